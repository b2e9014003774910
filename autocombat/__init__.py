"""autocombat: compiles declarative per-opponent combat policy into action programs."""

__version__ = "0.1.0"
