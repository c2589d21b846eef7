"""
Entry point: python -m jwtinfo <token>
"""

from .cli import main

if __name__ == "__main__":
    main()
