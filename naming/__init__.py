"""Benennungsvorlagen für Abgabedateien."""

from naming.template import NameCheck, NamingRule, TemplateError, expand, validate

__all__ = ["NameCheck", "NamingRule", "TemplateError", "expand", "validate"]
