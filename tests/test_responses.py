"""Tests for the reply template table and store knowledge."""

from storedesk.agents.support_agent import build_instruction
from storedesk.core.responses import RESPONSE_TEMPLATES, STORE_KNOWLEDGE, templates_for
from storedesk.models.intent import IntentType


class TestTemplateTable:
    def test_every_intent_has_templates(self) -> None:
        assert set(RESPONSE_TEMPLATES) == set(IntentType)
        assert all(RESPONSE_TEMPLATES[intent] for intent in IntentType)

    def test_template_counts(self) -> None:
        single = {IntentType.SHIPPING_CLARIFICATION, IntentType.ORDER_CANCELLATION}
        for intent, templates in RESPONSE_TEMPLATES.items():
            if intent in single:
                assert len(templates) == 1
            else:
                assert 2 <= len(templates) <= 3

    def test_templates_are_unique_strings(self) -> None:
        for templates in RESPONSE_TEMPLATES.values():
            assert all(isinstance(t, str) and t for t in templates)
            assert len(set(templates)) == len(templates)

    def test_templates_for(self) -> None:
        assert templates_for(IntentType.GREETING) is RESPONSE_TEMPLATES[IntentType.GREETING]


class TestStoreKnowledge:
    def test_delivery_templates_state_the_delivery_window(self) -> None:
        window = STORE_KNOWLEDGE["delivery_window"]
        for template in RESPONSE_TEMPLATES[IntentType.DELIVERY_TIME]:
            assert window in template

    def test_return_window_is_consistent(self) -> None:
        days = STORE_KNOWLEDGE["return_window_days"]
        for template in RESPONSE_TEMPLATES[IntentType.RETURNS_POLICY]:
            assert f"{days}" in template

    def test_support_hours_are_consistent(self) -> None:
        for template in RESPONSE_TEMPLATES[IntentType.SUPPORT_CONTACT]:
            assert STORE_KNOWLEDGE["support_hours"] in template

    def test_agent_instruction_uses_the_same_facts(self) -> None:
        instruction = build_instruction()
        assert STORE_KNOWLEDGE["delivery_window"] in instruction
        assert STORE_KNOWLEDGE["support_hours"] in instruction
        assert STORE_KNOWLEDGE["return_condition"] in instruction
        # ADK treats braces as state placeholders
        assert "{" not in instruction and "}" not in instruction
