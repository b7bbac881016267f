"""abafile - Direct Entry (ABA) payment files for provider payment batches."""

__version__ = "0.1.0"


# Import CLI and codec lazily so that importing the package stays cheap
def __getattr__(name):
    if name == "main":
        from abafile.cli.main import main
        return main
    if name == "DirectEntryFileCodec":
        from abafile.domain.aba import DirectEntryFileCodec
        return DirectEntryFileCodec
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
