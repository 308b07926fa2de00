"""Keyword-rule assistant: first matching rule answers, otherwise a fixed fallback."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from events_api.assistant import responders
from events_api.assistant.responders import AnalyticsTables
from events_api.utils.errors import Forbidden, ValidationError

logger = logging.getLogger(__name__)

ASSISTANT_ROLES = {"admin", "alumni", "employer"}


@dataclass(frozen=True)
class AssistantRule:
    name: str
    keywords: tuple[str, ...]
    respond: Callable[[AnalyticsTables, str], str]

    def matches(self, question: str) -> bool:
        return all(keyword in question for keyword in self.keywords)


RULES: list[AssistantRule] = [
    AssistantRule(
        "role_location_employer",
        ("full stack", "california", "mckinsey"),
        lambda data, role: responders.role_location_employer(data, "Full Stack", "California", "McKinsey", role),
    ),
    AssistantRule(
        "program_stats",
        ("data analytics", "alumni"),
        lambda data, role: responders.program_stats(data, "Data Analytics", role),
    ),
    AssistantRule(
        "employer_pattern",
        ("predict", "amazon"),
        responders.employer_pattern,
    ),
]


class AssistantService:
    def __init__(self, data: AnalyticsTables, rules: list[AssistantRule] = RULES):
        self._data = data
        self._rules = rules

    def answer(self, question: str | None, role: str | None) -> str:
        if not question or not role:
            raise ValidationError("Question and role are required.")
        if role not in ASSISTANT_ROLES:
            raise Forbidden("Role not permitted for assistant access.")

        lowered = question.lower()
        for rule in self._rules:
            if rule.matches(lowered):
                logger.info("Assistant rule %s answered for role %s", rule.name, role)
                return rule.respond(self._data, role)
        return responders.FALLBACK_MESSAGE
