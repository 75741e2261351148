"""
Allow running the package directly: python -m mandelview
"""
from .app import main

main()
