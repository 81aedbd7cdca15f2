"""txrules: transaction tracking with rule-based categorization."""

__all__ = ["main"]


def __getattr__(name):
    # txrules.main resolves to the CLI entry point on first access
    if name == "main":
        from txrules.cli.main import main

        return main
    raise AttributeError(f"module 'txrules' has no attribute '{name}'")
