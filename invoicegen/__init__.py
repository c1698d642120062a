"""Invoice authoring: one invoice record, ten visual templates, HTML and PDF exports."""

from .catalog import TEMPLATES, TEMPLATE_IDS, get_template
from .errors import InvoiceError, TemplateValidationError, UnknownTemplateError
from .exporter import ExportArtifact, export_markup, export_paginated, save_artifact
from .models import BankDetails, BillTo, InvoiceRecord, LineItem, default_invoice

__all__ = [
    "TEMPLATES",
    "TEMPLATE_IDS",
    "get_template",
    "InvoiceError",
    "TemplateValidationError",
    "UnknownTemplateError",
    "ExportArtifact",
    "export_markup",
    "export_paginated",
    "save_artifact",
    "BankDetails",
    "BillTo",
    "InvoiceRecord",
    "LineItem",
    "default_invoice",
]
