class UpstreamError(Exception):
    """An upstream data source could not deliver a usable response."""

    def __init__(self, source, message):
        super().__init__(f"{source}: {message}")
        self.source = source


# Raised while reading a 200 response whose JSON has an unexpected shape.
MALFORMED_RESPONSE = (AttributeError, TypeError, KeyError, IndexError, ValueError)
