"""Pipeline stages and their orchestration.

One module per stage (validator, content generator, metadata optimizer,
deployment builder) plus `pipeline`, which sequences them.
"""
