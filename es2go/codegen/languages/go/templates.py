"""
Built-in Jinja2 templates for Go output.
"""

from ...core.templates import TemplateEngine

STRUCT_TEMPLATE = """type {{ struct_name }} struct {
{% for field in fields %}
\t{{ field.name }} {{ field.type }} `json:"{{ field.json_name }}"`{{ " // " ~ field.comment if field.comment else "" }}
{% endfor %}
}

"""

FILE_TEMPLATE = """package {{ package_name }}

{% if imports %}
{{ imports }}

{% endif %}
{{ struct_definitions }}
"""

FILE_WITH_WRAPPER_TEMPLATE = """package {{ package_name }}

{% if imports %}
{{ imports }}

{% endif %}
type {{ wrapper_name }} struct {
\t{{ struct_name }}
}

{{ struct_definitions }}
"""

GO_TEMPLATES = {
    "struct.go.j2": STRUCT_TEMPLATE,
    "file.go.j2": FILE_TEMPLATE,
    "file_with_wrapper.go.j2": FILE_WITH_WRAPPER_TEMPLATE,
}


def create_go_template_engine() -> TemplateEngine:
    """Create a template engine with the Go templates registered."""
    engine = TemplateEngine()
    for name, source in GO_TEMPLATES.items():
        engine.add_template(name, source)
    return engine
