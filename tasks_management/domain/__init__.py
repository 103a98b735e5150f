"""Domain layer: enums, exceptions, and value rules (expiration date assembly, title).

No dependency on persistence or HTTP.
"""
