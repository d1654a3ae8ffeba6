class ColumnSortableException(ValueError):
    """Raised when a sort key cannot be split into exactly a relation and a column."""

    def __init__(self, parameter=None, separator='.'):
        self.parameter = parameter
        self.separator = separator
        if parameter is None:
            message = 'Invalid sort parameter.'
        else:
            message = (
                f"Invalid sort parameter '{parameter}': expected 'relation{separator}column'."
            )
        super().__init__(message)
