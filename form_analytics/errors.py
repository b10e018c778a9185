class AnalyticsError(Exception):
    """Base class for errors raised by form_analytics."""


class StoreError(AnalyticsError):
    """The form/submission/view store could not be read."""


class FormNotFoundError(StoreError):
    def __init__(self, form_id: str):
        super().__init__(f"Form not found: {form_id}")
        self.form_id = form_id


class ExportError(AnalyticsError):
    """Responses could not be exported."""
