"""Money Saver: track accounts, income, expenses and transfers."""

__version__ = "0.1.0"


# cli.main imports the domain and database packages; resolve it on first use
def __getattr__(name):
    if name == "main":
        from moneysaver.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
