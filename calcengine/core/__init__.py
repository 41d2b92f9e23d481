"""
Core domain models, mathematical primitives, and error taxonomy.

This module contains the foundational building blocks of the engine that are
independent of presentation and storage (console menus, history files).
"""
