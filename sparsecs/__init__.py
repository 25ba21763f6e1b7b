"""Compressed sparse matrices with products, Kronecker products, triangular solves and mesh Laplacians."""

__version__ = "0.1.0"