"""Email templates: template key -> HTML body (Jinja), wrapped in a shared layout."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from jinja2 import DictLoader, Environment, select_autoescape

from app.domain.exceptions import EmailTemplateNotFoundException
from app.shared.utils.datetime import utc_now

_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>WaveLaunch Studio Notification</title>
  <style>
    body { margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #f5f5f5; color: #1f2937; line-height: 1.6; }
    .email-wrapper { max-width: 600px; margin: 0 auto; background-color: #ffffff; }
    .email-header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 32px 24px; text-align: center; }
    .email-logo { color: #ffffff; font-size: 24px; font-weight: bold; margin: 0; }
    .email-body { padding: 32px 24px; }
    .email-footer { background-color: #f9fafb; padding: 24px; text-align: center; font-size: 12px; color: #6b7280; }
    .button { display: inline-block; padding: 12px 24px; background: #667eea; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600; margin: 16px 0; }
    .badge { display: inline-block; padding: 4px 12px; background-color: #e5e7eb; border-radius: 12px; font-size: 12px; font-weight: 600; }
    .info-box { background-color: #f3f4f6; border-left: 4px solid #667eea; padding: 16px; margin: 16px 0; border-radius: 4px; }
    .preheader { display: none !important; visibility: hidden; font-size: 1px; max-height: 0; overflow: hidden; }
  </style>
</head>
<body>
  <div class="preheader">{% block preheader %}{% endblock %}</div>
  <div class="email-wrapper">
    <div class="email-header"><h1 class="email-logo">WaveLaunch Studio</h1></div>
    <div class="email-body">
      <p>Hi {{ recipientName or "there" }},</p>
      {% block content %}{% endblock %}
      {% if actionUrl %}<a href="{{ actionUrl }}" class="button">{% block action_label %}View Project{% endblock %}</a>{% endif %}
    </div>
    <div class="email-footer">
      <p>This is an automated notification from WaveLaunch Studio.</p>
      <p>&copy; {{ year }} WaveLaunch Studio. All rights reserved.</p>
    </div>
  </div>
</body>
</html>
"""

# Context: the SEND_EMAIL action config merged over the triggering event data.
_DEFAULT_TEMPLATES: dict[str, str] = {
    "projectAssigned": """{% extends "_layout.html" %}
{% block preheader %}You've been assigned to {{ projectName }}{% endblock %}
{% block content %}
<h1>You've been assigned to a project!</h1>
<p><strong>{{ assignedBy or "WaveLaunch Studio" }}</strong> has assigned you as the lead strategist for:</p>
<div class="info-box"><h2>{{ projectName }}</h2></div>
<p>You can now manage this project, track progress, and collaborate with the team.</p>
{% endblock %}""",
    "approvalRequested": """{% extends "_layout.html" %}
{% block preheader %}Approval requested for {{ projectName }}{% endblock %}
{% block content %}
<h1>Approval Requested</h1>
<p><strong>{{ requestedBy or "A teammate" }}</strong> is requesting your approval for:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  {% if message %}<p>{{ message }}</p>{% endif %}
  {% if dueDate %}<p><strong>Due:</strong> {{ dueDate | long_date }}</p>{% endif %}
</div>
<p>Please review and provide your feedback.</p>
{% endblock %}
{% block action_label %}Review Now{% endblock %}""",
    "approvalApproved": """{% extends "_layout.html" %}
{% block preheader %}Your approval for {{ projectName }} was approved{% endblock %}
{% block content %}
<h1>Approval Approved</h1>
<p>Great news! <strong>{{ approvedBy }}</strong> has approved your request for:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  {% if feedback %}<p><strong>Feedback:</strong> {{ feedback }}</p>{% endif %}
</div>
<p>You can now proceed with the next steps.</p>
{% endblock %}""",
    "approvalChangesRequested": """{% extends "_layout.html" %}
{% block preheader %}Changes requested for {{ projectName }}{% endblock %}
{% block content %}
<h1>Changes Requested</h1>
<p><strong>{{ reviewedBy }}</strong> has requested changes for:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  {% if feedback %}<p><strong>Feedback:</strong> {{ feedback }}</p>{% endif %}
</div>
<p>Please review the feedback and make the necessary updates.</p>
{% endblock %}
{% block action_label %}View Feedback{% endblock %}""",
    "projectStatusChanged": """{% extends "_layout.html" %}
{% block preheader %}{{ projectName }} status changed to {{ newStatus }}{% endblock %}
{% block content %}
<h1>Project Status Updated</h1>
<p><strong>{{ changedBy or "WaveLaunch Studio" }}</strong> has updated the status of:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  <p><span class="badge">{{ oldStatus | humanize }}</span> &rarr; <span class="badge">{{ newStatus | humanize }}</span></p>
</div>
<p>Check the project to see the latest updates.</p>
{% endblock %}""",
    "commentMentioned": """{% extends "_layout.html" %}
{% block preheader %}{{ authorName }} mentioned you in {{ projectName }}{% endblock %}
{% block content %}
<h1>You were mentioned</h1>
<p><strong>{{ authorName }}</strong> mentioned you in a comment on:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  <p>"{{ (commentText or "") | truncate(203, True, "...", 0) }}"</p>
</div>
{% endblock %}
{% block action_label %}View Comment{% endblock %}""",
    "phaseCompleted": """{% extends "_layout.html" %}
{% block preheader %}{{ phaseName }} completed for {{ projectName }}{% endblock %}
{% block content %}
<h1>Phase Completed</h1>
<p>Congratulations! The <strong>{{ phaseName }}</strong> phase has been completed for:</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  {% if nextPhase %}<p><strong>Next Phase:</strong> {{ nextPhase }}</p>{% endif %}
</div>
<p>Great progress! Keep the momentum going.</p>
{% endblock %}""",
    "projectLaunched": """{% extends "_layout.html" %}
{% block preheader %}{{ projectName }} has launched!{% endblock %}
{% block content %}
<h1>Project Launched!</h1>
<p>Exciting news! <strong>{{ projectName }}</strong> has officially launched!</p>
<div class="info-box">
  <h2>{{ projectName }}</h2>
  {% if launchDate %}<p><strong>Launch Date:</strong> {{ launchDate | long_date }}</p>{% endif %}
  {% if teamMembers %}<p><strong>Team Size:</strong> {{ teamMembers }} members</p>{% endif %}
</div>
<p>Thank you for your hard work and dedication to make this launch successful!</p>
{% endblock %}""",
    "weeklyDigest": """{% extends "_layout.html" %}
{% block preheader %}Your weekly digest from WaveLaunch Studio{% endblock %}
{% block content %}
<h1>Your Weekly Digest</h1>
<p>Here's a summary of your activity this week:</p>
<div class="info-box">
  <h2>This Week's Stats</h2>
  <p><strong>{{ projectsCount or 0 }}</strong> active projects</p>
  <p><strong>{{ approvalsCount or 0 }}</strong> approvals pending</p>
  <p><strong>{{ completedTasksCount or 0 }}</strong> tasks completed</p>
</div>
{% endblock %}
{% block action_label %}View Dashboard{% endblock %}""",
}


def _long_date(value: Any) -> str:
    """Format a datetime or ISO string as 'March 5, 2025'; other values pass through."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime):
        return f"{value:%B} {value.day}, {value.year}"
    return str(value)


def _humanize(value: Any) -> str:
    return str(value or "").replace("_", " ")


class EmailTemplateRenderer:
    """Renders the HTML body for a SEND_EMAIL template key."""

    def __init__(self, templates: dict[str, str] | None = None) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        self._env = Environment(
            loader=DictLoader({"_layout.html": _LAYOUT, **self._templates}),
            autoescape=select_autoescape(default_for_string=True, default=True),
        )
        self._env.filters["long_date"] = _long_date
        self._env.filters["humanize"] = _humanize

    @property
    def template_keys(self) -> list[str]:
        return sorted(self._templates)

    def has_template(self, template_key: str) -> bool:
        return template_key in self._templates

    def render(self, template_key: str, data: dict[str, Any]) -> str:
        """Render the HTML body for template_key.

        Raises:
            EmailTemplateNotFoundException: If template_key is unknown.
        """
        if not self.has_template(template_key):
            raise EmailTemplateNotFoundException(template_key)
        ctx = {"year": utc_now().year, **data}
        return self._env.get_template(template_key).render(ctx)
