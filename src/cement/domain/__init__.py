"""Domain layer — idiom records and parsed commands.

Pure data with no I/O. Infrastructure and services depend on this layer,
never the reverse.
"""
