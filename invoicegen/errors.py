class InvoiceError(Exception):
    """Base class for errors raised by the invoicegen package."""


class UnknownTemplateError(InvoiceError, ValueError):
    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown invoice template: {template_id!r}")


class TemplateValidationError(InvoiceError, ValueError):
    """A rendered document is not self-contained."""

    def __init__(self, template_id: str, errors):
        self.template_id = template_id
        self.errors = list(errors)
        super().__init__(f"Template {template_id!r} failed validation: " + "; ".join(self.errors))
