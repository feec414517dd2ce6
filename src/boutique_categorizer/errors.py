"""Exceptions raised by the categorizer."""


class RegistryError(ValueError):
    """Category configuration is invalid."""


class CorruptMappingError(RuntimeError):
    """Refusing to overwrite a mapping file that could not be parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"{path} could not be parsed ({reason}); saving would discard its contents. "
            "Fix the file or save with force to overwrite it."
        )
