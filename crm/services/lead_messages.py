from jinja2 import Environment, StrictUndefined

from ..models import Lead

_env = Environment(autoescape=False, undefined=StrictUndefined)

APPROVED_TEMPLATE = _env.from_string(
    "🎉 Good News!\n"
    "\n"
    "{% for name, status, link in licenses %}"
    "{% if not loop.first %}\n{% endif %}"
    "✅ Licence : {{ name }}  :  {{ status }}  ({{ link or 'Download' }})"
    "{% endfor %}\n"
    "\n"
    '🔘 TYPE " HI " TO START FROM START'
)

REJECTED_TEMPLATE = _env.from_string(
    "❌ We regret to inform you that your {{ licence_name }} has been REJECTED.\n"
    "\n"
    "Please reapply after 24-48 hours with proper documentation.\n"
    "\n"
    '🔘 TYPE "HI" TO START FROM START'
)


def approved_message(lead: Lead) -> str:
    # Only license slots with both a name and a status are announced.
    licenses = [
        (name, status, link) for name, status, link in lead.licenses() if name and status
    ]
    return APPROVED_TEMPLATE.render(licenses=licenses)


def rejected_message(lead: Lead) -> str:
    names = [name for name, _, _ in lead.licenses() if name]
    return REJECTED_TEMPLATE.render(licence_name=names[0] if names else "[Licence Name]")
