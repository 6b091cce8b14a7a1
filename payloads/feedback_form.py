# payloads/feedback_form.py
# =============================================================================
# 📝 Feedback-Formular QR – externe Formulare oder eigener Submission-Endpunkt
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from payloads.base import Payload, compact
from payloads.checks import (
    check_length,
    choice,
    flag,
    optional_int,
    optional_list,
    optional_text,
    optional_url,
    require_text,
)
from payloads.errors import BadFormat, MissingField, OutOfRange
from payloads.normalizers import clean_text

QUESTION_TYPES = ("rating", "text", "textarea", "multiple-choice", "yes-no", "scale")
RATING_TYPES = ("stars", "numbers", "emoji", "thumbs")
DEFAULT_THANK_YOU = "Thank you for your feedback!"
MAX_QUESTIONS = 20


@dataclass(frozen=True)
class Question:
    question: str
    type: str = "text"
    required: bool = False
    options: Tuple[str, ...] = ()
    min: Optional[int] = None
    max: Optional[int] = None
    min_label: Optional[str] = None
    max_label: Optional[str] = None

    def as_dict(self) -> dict:
        return compact({
            "question": self.question,
            "type": self.type,
            "required": self.required,
            "options": list(self.options) or None,
            "min": self.min,
            "max": self.max,
            "minLabel": self.min_label,
            "maxLabel": self.max_label,
        })


@dataclass(frozen=True)
class FeedbackFormFields:
    form_title: str
    destination: str
    form_description: Optional[str] = None
    form_url: Optional[str] = None
    submission_url: Optional[str] = None
    questions: Tuple[Question, ...] = ()
    business_name: Optional[str] = None
    rating_type: str = "stars"
    collect_email: bool = False
    collect_name: bool = False
    thank_you_message: str = DEFAULT_THANK_YOU


def _question(raw: Any, index: int) -> Question:
    prefix = f"questions[{index}]"
    if not isinstance(raw, Mapping):
        raise BadFormat(prefix, f"Question {index + 1} must be an object")

    text = clean_text(raw.get("question"))
    if text is None:
        raise MissingField(f"{prefix}.question", f"Question {index + 1} is missing 'question' field")
    check_length(f"{prefix}.question", text, max_len=500)

    q_type = choice(raw, "type", QUESTION_TYPES, default="text")
    required = flag(raw, "required")
    options: Tuple[str, ...] = ()
    low = high = None
    min_label = max_label = None

    if q_type == "multiple-choice":
        items = raw.get("options")
        if not isinstance(items, (list, tuple)) or len(items) < 2:
            raise OutOfRange(
                f"{prefix}.options", f"Question {index + 1}: Multiple choice requires at least 2 options"
            )
        options = tuple(str(item).strip() for item in items)

    if q_type in ("rating", "scale"):
        low = optional_int(raw, "min")
        high = optional_int(raw, "max")
        low = 1 if low is None else low
        high = 5 if high is None else high
        if high <= low:
            raise OutOfRange(f"{prefix}.max", f"Question {index + 1}: Max must be greater than min")

    if q_type == "scale":
        min_label = optional_text(raw, "minLabel")
        max_label = optional_text(raw, "maxLabel")

    return Question(text, q_type, required, options, low, high, min_label, max_label)


def validate(raw: Mapping[str, Any]) -> FeedbackFormFields:
    form_title = require_text(raw, "formTitle", min_len=2, max_len=200)
    form_description = optional_text(raw, "formDescription", max_len=1000)
    form_url = optional_url(raw, "formUrl")
    submission_url = optional_url(raw, "submissionUrl")

    entries = optional_list(raw, "questions") or []
    if len(entries) > MAX_QUESTIONS:
        raise OutOfRange("questions", f"Maximum {MAX_QUESTIONS} questions allowed")
    questions = tuple(_question(item, i) for i, item in enumerate(entries))

    business_name = optional_text(raw, "businessName", max_len=200)
    rating_type = choice(raw, "ratingType", RATING_TYPES, default="stars")
    collect_email = flag(raw, "collectEmail")
    collect_name = flag(raw, "collectName")
    thank_you = optional_text(raw, "thankYouMessage", max_len=500) or DEFAULT_THANK_YOU

    destination = form_url or submission_url
    if destination is None:
        raise MissingField("formUrl", "Either formUrl or submissionUrl is required")

    return FeedbackFormFields(
        form_title=form_title,
        destination=destination,
        form_description=form_description,
        form_url=form_url,
        submission_url=submission_url,
        questions=questions,
        business_name=business_name,
        rating_type=rating_type,
        collect_email=collect_email,
        collect_name=collect_name,
        thank_you_message=thank_you,
    )


def build(fields: FeedbackFormFields) -> Payload:
    form = compact({
        "title": fields.form_title,
        "description": fields.form_description,
        "businessName": fields.business_name,
        "ratingType": fields.rating_type,
        "collectEmail": fields.collect_email,
        "collectName": fields.collect_name,
        "thankYouMessage": fields.thank_you_message,
    })
    if fields.questions:
        form["questions"] = [q.as_dict() for q in fields.questions]
        form["questionCount"] = len(fields.questions)

    metadata = compact({
        "form": form,
        "submissionUrl": fields.submission_url,
        "implementationPhase": "external-form" if fields.form_url else "basic-structure",
        "note": (
            "Using external form service (Google Forms, Typeform, etc.)"
            if fields.form_url else "Using custom submission URL - requires form implementation"
        ),
    })
    return Payload("feedback-form", fields.destination, metadata, label=fields.form_title)
