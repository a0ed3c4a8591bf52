"""typeflip - translate TypeScript conditional types to if/else functions and back"""

__version__ = "1.0.0"
