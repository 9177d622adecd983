"""
Mint Contracts

Modular registries whose mints are authorized and settled by installed
modules: capabilities, claim conditions, allowlists, signed requests and
sale settlement.
"""
