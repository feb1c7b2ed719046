"""Sample workflows and messages for demos and default configs."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..core.config import WorkflowDefinition
from ..core.models import Message, utcnow

DEFAULT_RECIPIENT = "you@example.com"

_DEFAULT_WORKFLOWS: list[dict[str, Any]] = [
    {
        "id": "scholarship-autopilot",
        "name": "Scholarship autopilot",
        "description": "Completes scholarship follow-ups and finalist forms end to end.",
        "trigger": {
            "keywords": ["scholarship", "finalist", "transcript", "questionnaire"],
            "categories": ["scholarship"],
            "auto_detect": True,
        },
        "actions": [
            {
                "id": "scholarship-analysis",
                "type": "analysis",
                "summary": "Extract requirements and deadline",
                "details": "Parse the request for forms, attachments and due dates.",
            },
            {
                "id": "scholarship-documents",
                "type": "collect_documents",
                "summary": "Collect transcript and video statement",
                "details": "Pull the latest transcript and personal statement from the vault.",
            },
            {
                "id": "scholarship-submit",
                "type": "submit_application",
                "summary": "Submit finalist questionnaire",
                "details": "Fill the finalist portal form and attach the collected documents.",
            },
            {
                "id": "scholarship-notify",
                "type": "notify_whatsapp",
                "summary": "Scholarship application submitted",
                "details": "Confirmation number stored in the tracker.",
            },
        ],
        "autopilot": True,
        "sla_minutes": 20,
        "success_metric": "Finalist forms submitted before the deadline",
        "playbook_highlights": ["Auto-submits finalist forms", "WhatsApp confirmation"],
    },
    {
        "id": "job-application-sprint",
        "name": "Job application sprint",
        "description": "Applies to recruiter requests through the linked careers portal.",
        "trigger": {
            "keywords": ["apply", "role", "recruit", "hiring"],
            "categories": ["job"],
            "auto_detect": True,
        },
        "actions": [
            {
                "id": "job-analysis",
                "type": "analysis",
                "summary": "Score role fit",
                "details": "Compare the role against the saved profile and preferences.",
            },
            {
                "id": "job-submit",
                "type": "submit_application",
                "summary": "Apply through the careers portal",
                "details": "Submit resume and cover letter via the linked application page.",
            },
            {
                "id": "job-tracker",
                "type": "update_tracker",
                "summary": "Log application in pipeline tracker",
                "details": "Add company, role and follow-up date to the tracker.",
            },
            {
                "id": "job-notify",
                "type": "notify_whatsapp",
                "summary": "Job application sent",
                "details": "Recruiter loop triggered; follow-up scheduled.",
            },
        ],
        "autopilot": True,
        "sla_minutes": 45,
        "success_metric": "Applications sent the same day",
        "playbook_highlights": ["Same-day applications", "Tracker kept current"],
    },
    {
        "id": "client-support-concierge",
        "name": "Client support concierge",
        "description": "Drafts short client replies and coordinates with the ops team.",
        "trigger": {
            "keywords": ["confirm", "client", "onboarding"],
            "categories": ["support", "client"],
            "auto_detect": True,
        },
        "actions": [
            {
                "id": "support-analysis",
                "type": "analysis",
                "summary": "Summarize the client question",
                "details": "Identify what needs confirming and who owns it.",
            },
            {
                "id": "support-reply",
                "type": "draft_reply",
                "summary": "Draft confirmation reply",
                "details": "Prepare a short reply confirming the onboarding packet status.",
            },
            {
                "id": "support-coordinate",
                "type": "coordinate",
                "summary": "Loop in the ops owner",
                "details": "Share the draft with the ops owner for a final check.",
            },
        ],
        "autopilot": False,
        "sla_minutes": 60,
        "success_metric": "Client answered within the hour",
        "playbook_highlights": ["Human-in-the-loop replies"],
    },
]

_MESSAGE_TEMPLATES: list[dict[str, Any]] = [
    {
        "subject": "Scholarship follow-up #{counter}",
        "sender": "awards@brightfuture{counter}.edu",
        "preview": "We're excited to move you to the final round pending a short form.",
        "body": (
            "Hello again,\n\n"
            "We loved your profile and just need you to complete the finalist "
            "questionnaire. Please upload your updated transcript and personal "
            "video statement.\n\n"
            "Submit here: https://apply.brightfuture.edu/finalist\n\nThanks!"
        ),
        "tags": ["scholarship", "follow-up"],
    },
    {
        "subject": "Backend role opportunity - Round {counter}",
        "sender": "recruiter{counter}@techhire.io",
        "preview": "Can you apply through our Greenhouse portal this afternoon?",
        "body": (
            "Hi,\n\n"
            "Loved your OSS work. Please apply via https://careers.techhire.io/apply "
            "so we can trigger the hiring loop. Need this today.\n\n"
            "Cheers,\nRecruiting Team"
        ),
        "tags": ["job", "backend"],
    },
    {
        "subject": "Quick documentation question",
        "sender": "ops{counter}@growthloops.com",
        "preview": "Client asked for confirmation on the onboarding packet you mentioned.",
        "body": (
            "Hey!\n\n"
            "Can you confirm if the onboarding packet was sent? Need a short reply "
            "to the client.\n\nThanks!"
        ),
        "tags": ["support", "client"],
    },
]


def default_workflows() -> list[WorkflowDefinition]:
    """Return fresh copies of the built-in workflows."""
    return [WorkflowDefinition.model_validate(data) for data in _DEFAULT_WORKFLOWS]


def generate_sample_message(counter: int, now: datetime | None = None) -> Message:
    """Build a sample inbound message, cycling through three templates."""
    template = _MESSAGE_TEMPLATES[counter % len(_MESSAGE_TEMPLATES)]
    sender = template["sender"].format(counter=counter)
    return Message(
        id=f"email-generated-{counter}",
        subject=template["subject"].format(counter=counter),
        sender=sender,
        sender_name=sender.split("@")[0],
        to=DEFAULT_RECIPIENT,
        preview=template["preview"],
        body=template["body"],
        received_at=now or utcnow(),
        tags=tuple(template["tags"]),
    )
