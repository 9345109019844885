"""
showcase - Creative Showcase image-sharing gallery built with Streamlit

A local-first gallery where people can:
- Register an account and log in with a bcrypt-protected password
- Upload images with a title and description
- Browse a public landing wall and per-user profiles
- Manage their own images from a private dashboard

All state lives in a key-value store (DuckDB by default) on this installation.
"""

__version__ = "0.1.0"
__author__ = "showcase"
__description__ = "Creative Showcase image-sharing gallery with Streamlit"
