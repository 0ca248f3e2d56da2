"""Plain text field."""

from rdf_formgen.forms.field_widget import FieldWidget


class Text(FieldWidget):
    """Line-edit per value; all behavior comes from FieldWidget."""

    widget_type = "text"
