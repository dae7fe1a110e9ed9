"""Poseidon duplex sponge over prime fields, absorbable encodings and Grain LFSR parameters."""

__version__ = "0.1.0"
__all__ = ["fields", "absorb", "sponge", "grain_lfsr", "params", "poseidon"]