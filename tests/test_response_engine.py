"""Tests for the response selector, carry-over and the session intent store."""

import random
import threading

import pytest

from storedesk.core.observability import metrics_collector
from storedesk.core.response_engine import ResponseSelector
from storedesk.core.responses import EMPTY_MESSAGE_REPLY, RESPONSE_TEMPLATES
from storedesk.core.session_store import SessionIntentStore
from storedesk.models.intent import IntentType


class TestResolveTurn:
    def test_reply_matches_intent_templates(self, selector: ResponseSelector) -> None:
        turn = selector.resolve_turn("s1", "Do you ship to Canada?")
        assert turn.intent is IntentType.SHIPPING_LOCATION
        assert turn.reply_text in RESPONSE_TEMPLATES[IntentType.SHIPPING_LOCATION]
        assert not turn.carry_over_applied

    def test_records_resolved_intent(self, selector: ResponseSelector, store: SessionIntentStore) -> None:
        selector.resolve_turn("s1", "where is my order")
        assert store.get("s1") is IntentType.TRACKING_STATUS

    def test_single_template_intents(self, selector: ResponseSelector) -> None:
        turn = selector.resolve_turn("s1", "shipping?")
        assert turn.intent is IntentType.SHIPPING_CLARIFICATION
        assert turn.reply_text == RESPONSE_TEMPLATES[IntentType.SHIPPING_CLARIFICATION][0]

        turn = selector.resolve_turn("s2", "I want to cancel my order")
        assert turn.reply_text == RESPONSE_TEMPLATES[IntentType.ORDER_CANCELLATION][0]

    def test_context_flows_between_turns(self, selector: ResponseSelector, store: SessionIntentStore) -> None:
        selector.resolve_turn("s1", "hi")
        assert selector.resolve_turn("s1", "international shipping").intent is IntentType.SHIPPING_LOCATION
        assert store.get("s1") is IntentType.SHIPPING_LOCATION
        assert selector.resolve_turn("s1", "how long").intent is IntentType.DELIVERY_TIME

    def test_first_turn_short_shipping_mention(self, selector: ResponseSelector) -> None:
        turn = selector.resolve_turn("fresh", "international shipping")
        assert turn.intent is IntentType.SHIPPING_CLARIFICATION

    def test_seeded_selection_is_reproducible(self) -> None:
        messages = ["hello", "how long will it take to arrive", "refund?", "banana"]
        first = ResponseSelector(rng=random.Random(42))
        second = ResponseSelector(rng=random.Random(42))
        replies_a = [first.resolve_turn("s", m).reply_text for m in messages]
        replies_b = [second.resolve_turn("s", m).reply_text for m in messages]
        assert replies_a == replies_b

    def test_updates_metrics(self, selector: ResponseSelector) -> None:
        selector.resolve_turn("s1", "hello")
        selector.resolve_turn("s1", "banana")
        assert metrics_collector.total_turns == 2
        assert metrics_collector.intent_counts["greeting"] == 1
        assert metrics_collector.get_fallback_rate() == 0.5


class TestEmptyInput:
    @pytest.mark.parametrize("utterance", ["", "   ", "\n\t "])
    def test_fixed_reply(self, selector: ResponseSelector, utterance: str) -> None:
        turn = selector.resolve_turn("s1", utterance)
        assert turn.reply_text == EMPTY_MESSAGE_REPLY
        assert turn.intent is IntentType.FALLBACK

    def test_does_not_touch_session(self, selector: ResponseSelector, store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        selector.resolve_turn("s1", "   ")
        assert store.get("s1") is IntentType.RETURNS_POLICY

        selector.resolve_turn("s2", "")
        assert "s2" not in store


class TestCarryOver:
    def test_short_follow_up_inherits_previous(self, selector: ResponseSelector,
                                               store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        turn = selector.resolve_turn("s1", "and it?")
        assert turn.intent is IntentType.RETURNS_POLICY
        assert turn.carry_over_applied
        assert turn.reply_text in RESPONSE_TEMPLATES[IntentType.RETURNS_POLICY]
        assert store.get("s1") is IntentType.RETURNS_POLICY

    def test_where_after_shipping_policy(self, selector: ResponseSelector,
                                         store: SessionIntentStore) -> None:
        store.set("s1", IntentType.SHIPPING_POLICY)
        assert selector.resolve_turn("s1", "Where?").intent is IntentType.SHIPPING_POLICY

    def test_needs_previous_intent(self, selector: ResponseSelector) -> None:
        turn = selector.resolve_turn("s1", "and it?")
        assert turn.intent is IntentType.FALLBACK
        assert not turn.carry_over_applied

    def test_long_message_is_not_carried_over(self, selector: ResponseSelector,
                                              store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        turn = selector.resolve_turn("s1", "that is something else entirely")
        assert turn.intent is IntentType.FALLBACK

    def test_needs_soft_keyword(self, selector: ResponseSelector, store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        turn = selector.resolve_turn("s1", "ok thanks")
        assert turn.intent is IntentType.FALLBACK
        assert store.get("s1") is IntentType.FALLBACK

    def test_soft_keyword_is_whole_word(self, selector: ResponseSelector,
                                        store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        # "it" inside "bit" must not count
        assert selector.resolve_turn("s1", "a bit odd").intent is IntentType.FALLBACK

    def test_only_applies_to_fallback(self, selector: ResponseSelector,
                                      store: SessionIntentStore) -> None:
        store.set("s1", IntentType.RETURNS_POLICY)
        turn = selector.resolve_turn("s1", "hello")
        assert turn.intent is IntentType.GREETING
        assert not turn.carry_over_applied


class TestSessionIsolation:
    def test_sessions_do_not_share_context(self, selector: ResponseSelector,
                                           store: SessionIntentStore) -> None:
        selector.resolve_turn("a", "where is my order")
        selector.resolve_turn("b", "hello")
        selector.resolve_turn("a", "banana")

        assert store.get("b") is IntentType.GREETING
        # b carries over its own greeting, never a's tracking context
        assert selector.resolve_turn("b", "is it here yet").intent is IntentType.GREETING


class TestTemplateMembership:
    @pytest.mark.parametrize("utterance", [
        "hello", "Do you ship to Canada?", "what are your shipping options",
        "How long will it take to arrive?", "where is my order", "Can I get a refund?",
        "what is the process", "I need to talk to a human", "cancel my order",
        "any coupons or discount?", "banana bread", "shipping?",
    ])
    def test_reply_belongs_to_resolved_intent(self, utterance: str) -> None:
        for seed in range(5):
            selector = ResponseSelector(rng=random.Random(seed))
            turn = selector.resolve_turn("s", utterance)
            assert turn.reply_text in RESPONSE_TEMPLATES[turn.intent]


class TestSessionIntentStore:
    def test_unknown_session_is_none(self) -> None:
        assert SessionIntentStore().get("missing") is None

    def test_last_write_wins(self) -> None:
        store = SessionIntentStore()
        store.set("s", IntentType.GREETING)
        store.set("s", IntentType.DELIVERY_TIME)
        assert store.get("s") is IntentType.DELIVERY_TIME
        assert len(store) == 1

    def test_rejects_non_intent_values(self) -> None:
        store = SessionIntentStore()
        with pytest.raises(TypeError):
            store.set("s", "greeting")
        assert store.get("s") is None

    def test_concurrent_writes_for_many_sessions(self) -> None:
        store = SessionIntentStore()
        intents = list(IntentType)

        def worker(index: int) -> None:
            for i in range(200):
                store.set(f"session-{index}", intents[i % len(intents)])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 8
        for n in range(8):
            assert store.get(f"session-{n}") is intents[199 % len(intents)]
