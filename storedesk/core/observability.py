"""
Observability Infrastructure

Provides tracing, structured logging, and metrics collection for chat turns.
Resolved intents are only ever surfaced here, never in API responses, so
this is where intent distribution and carry-over behaviour can be audited.
"""

import logging
import threading
import structlog
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional
from uuid import uuid4

from storedesk.models.intent import IntentType


# Configure structured logging
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
)

logger = structlog.get_logger()


@dataclass
class TurnTrace:
    """
    Trace of a single chat turn, from incoming message to reply.

    Each turn gets a unique trace_id so the decisions taken for it
    (classification, carry-over, real-model fallback) can be followed
    in the logs.

    Attributes:
        trace_id: Unique UUID for this turn
        session_id: Conversation the turn belongs to
        timestamp: When the trace started
        decision_points: Decisions made while handling the turn
        metrics: Outcome and timing, filled by finalize()
        start_time: For calculating response time

    Usage:
        trace = TurnTrace.create(session_id="3f2a...")
        trace.log_decision("carry_over", "short follow-up", {"previous": "returns_policy"})
        trace.finalize(intent=IntentType.RETURNS_POLICY, carry_over_applied=True)
    """
    trace_id: str
    session_id: str
    timestamp: datetime
    decision_points: List[Dict[str, Any]] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(cls, session_id: str) -> 'TurnTrace':
        """
        Factory method to create a new trace with auto-generated UUID.

        Args:
            session_id: Conversation the turn belongs to

        Returns:
            TurnTrace: New trace instance ready for logging
        """
        trace_id = str(uuid4())
        logger.info(
            "trace_created",
            trace_id=trace_id,
            session_id=session_id
        )
        return cls(
            trace_id=trace_id,
            session_id=session_id,
            timestamp=datetime.now()
        )

    def log_decision(self, decision: str, reason: str, context: Optional[Dict] = None):
        """
        Record a decision point for debugging.

        Args:
            decision: What was decided (e.g., "carry_over")
            reason: Why this decision was made
            context: Additional metadata about the decision
        """
        decision_entry = {
            "decision": decision,
            "reason": reason,
            "timestamp": datetime.now().isoformat(),
            "context": context or {}
        }
        self.decision_points.append(decision_entry)

        logger.info(
            "decision_made",
            trace_id=self.trace_id,
            decision=decision,
            reason=reason,
            context=context
        )

    def finalize(self, intent: IntentType, carry_over_applied: bool = False):
        """
        Mark the trace as complete and record final metrics.

        Args:
            intent: Intent the turn was resolved to
            carry_over_applied: Whether the previous intent was carried over
        """
        end_time = datetime.now()
        response_time = (end_time - self.start_time).total_seconds()

        self.metrics.update({
            "intent": intent.value,
            "carry_over_applied": carry_over_applied,
            "response_time_seconds": response_time,
            "decision_count": len(self.decision_points)
        })

        logger.info(
            "trace_completed",
            trace_id=self.trace_id,
            session_id=self.session_id,
            intent=intent.value,
            carry_over_applied=carry_over_applied,
            response_time=response_time
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize trace for storage or analysis"""
        return {
            "trace_id": self.trace_id,
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "decision_points": self.decision_points,
            "metrics": self.metrics
        }


@dataclass
class MetricsCollector:
    """
    Aggregates metrics across all chat turns.

    Key Metrics:
        - Intent distribution: how often each intent is resolved
        - Fallback Rate: % of turns the engine could not classify
        - Carry-over count: short follow-ups that inherited the previous intent
        - Model errors: failed calls to the real language model
    """
    total_turns: int = 0
    carry_overs: int = 0
    model_errors: int = 0
    total_response_time: float = 0.0
    intent_counts: Counter = field(default_factory=Counter)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_turn(self, intent: IntentType, response_time: float = 0.0,
                    carry_over_applied: bool = False):
        """
        Record a resolved turn.

        Args:
            intent: Resolved intent
            response_time: Time taken to respond (seconds)
            carry_over_applied: Whether the previous intent was carried over
        """
        with self._lock:
            self.total_turns += 1
            self.total_response_time += response_time
            self.intent_counts[intent.value] += 1
            if carry_over_applied:
                self.carry_overs += 1

        logger.info(
            "metrics_updated",
            total_turns=self.total_turns,
            intent=intent.value,
            fallback_rate=self.get_fallback_rate()
        )

    def record_model_error(self, error_type: str):
        """Count a failed real-model call"""
        with self._lock:
            self.model_errors += 1
        logger.warning("model_error_recorded", error_type=error_type, total=self.model_errors)

    def get_fallback_rate(self) -> float:
        """Calculate fallback rate (0.0 to 1.0)"""
        if self.total_turns == 0:
            return 0.0
        return self.intent_counts[IntentType.FALLBACK.value] / self.total_turns

    def get_avg_response_time(self) -> float:
        """Calculate average response time in seconds"""
        if self.total_turns == 0:
            return 0.0
        return self.total_response_time / self.total_turns

    def reset(self):
        """Clear all counters"""
        with self._lock:
            self.total_turns = 0
            self.carry_overs = 0
            self.model_errors = 0
            self.total_response_time = 0.0
            self.intent_counts.clear()

    def get_report(self) -> str:
        """Generate a human-readable metrics report"""
        intent_lines = "\n".join(
            f"  • {name}: {count}" for name, count in self.intent_counts.most_common()
        ) or "  • (none yet)"
        return f"""
╔═══════════════════════════════════════╗
║       StoreDesk Metrics Report        ║
╚═══════════════════════════════════════╝

Total Turns: {self.total_turns}

Intent Breakdown:
{intent_lines}

Context:
  • Carry-overs: {self.carry_overs}
  • Fallback Rate: {self.get_fallback_rate():.1%}

Performance:
  • Avg Response Time: {self.get_avg_response_time():.2f}s
  • Model Errors: {self.model_errors}
        """.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Export metrics for analysis"""
        return {
            "total_turns": self.total_turns,
            "intent_counts": dict(self.intent_counts),
            "carry_overs": self.carry_overs,
            "fallback_rate": self.get_fallback_rate(),
            "avg_response_time": self.get_avg_response_time(),
            "model_errors": self.model_errors
        }


# Global metrics instance (singleton pattern)
metrics_collector = MetricsCollector()
