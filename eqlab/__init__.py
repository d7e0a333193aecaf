"""Parametric EQ modelling and preset export."""
__version__ = "0.1.0"
