""" Errors raised while loading a Dify DSL document. """


class ParseError(ValueError):
    """Raised when a document (or a node/edge inside it) cannot be loaded.

    Subclasses ValueError so callers validating raw YAML can keep catching
    ValueError. The original exception, if any, is chained as __cause__.
    """
