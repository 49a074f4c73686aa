"""
Two-hand gesture recognition and spawn triggering.
"""
import logging
from typing import Optional, Sequence, Tuple, Any

from .config import GestureConfig, TriggerConfig
from .errors import InvalidObservation
from .geometry import as_observation, centroid, clamp, distance, midpoint
from .stability import StabilityTracker
from .types import GestureMetrics, GestureResult, GestureState, SpawnEvent, WRIST

logger = logging.getLogger(__name__)

REASON_WRONG_HAND_COUNT = "wrong hand count"
REASON_TOO_FAR = "hands too far apart"
REASON_MOVING = "hands moving"
REASON_DETECTED = "gesture detected"
REASON_INVALID = "invalid observation"


class GestureClassifier:
    """
    Detects two hands held close together and still.

    Features:
    - Hard proximity gate on wrist and hand-center distance
    - Stillness gate from the stability tracker, so hands passing close
      while moving never qualify
    - Confidence weighted between wrist proximity and stillness

    The stability tracker is advanced exactly once per classify() call.
    """

    def __init__(self, cfg: Optional[GestureConfig] = None, tracker: Optional[StabilityTracker] = None):
        """Initialize the classifier with calibration and a stability tracker."""
        self.cfg = cfg or GestureConfig()
        self.tracker = tracker or StabilityTracker(
            movement_scale=self.cfg.movement_scale,
            neutral_stillness=self.cfg.neutral_stillness
        )

    def classify(self, hands: Sequence[Any]) -> GestureResult:
        """
        Classify one frame of hand observations.

        Args:
            hands: 0, 1 or 2 hand observations; index is the hand slot

        Returns:
            GestureResult; confidence is 0 whenever detected is False

        Raises:
            InvalidObservation: if either hand is malformed. Stability history
                is not advanced in that case.
        """
        if len(hands) != 2:
            self.tracker.reset()
            return GestureResult(detected=False, confidence=0.0, metrics=None,
                                 reason=REASON_WRONG_HAND_COUNT)

        # Validate both hands before touching tracker state
        hand_a = as_observation(hands[0])
        hand_b = as_observation(hands[1])

        wrist_distance = distance(hand_a[WRIST], hand_b[WRIST])
        center_distance = distance(centroid(hand_a), centroid(hand_b))
        stability = (self.tracker.update(0, hand_a) + self.tracker.update(1, hand_b)) / 2.0
        proximity = max(0.0, 1.0 - wrist_distance / self.cfg.wrist_distance_max)

        metrics = GestureMetrics(
            wrist_distance=wrist_distance,
            center_distance=center_distance,
            proximity=proximity,
            stability=stability
        )

        is_close = (wrist_distance < self.cfg.wrist_distance_max and
                    center_distance < self.cfg.center_distance_max)
        is_stable = stability > self.cfg.stability_min

        if not is_close:
            return GestureResult(detected=False, confidence=0.0, metrics=metrics, reason=REASON_TOO_FAR)
        if not is_stable:
            return GestureResult(detected=False, confidence=0.0, metrics=metrics, reason=REASON_MOVING)

        weight = self.cfg.proximity_weight
        confidence = clamp(proximity * weight + stability * (1.0 - weight), 0.0, 1.0)
        return GestureResult(detected=True, confidence=confidence, metrics=metrics, reason=REASON_DETECTED)

    def reset(self) -> None:
        self.tracker.reset()


class TriggerPolicy:
    """
    Debounces confident detections into spawn triggers.

    At most one trigger fires per cooldown window no matter how many
    consecutive frames clear the confidence threshold.
    """

    def __init__(self, cfg: Optional[TriggerConfig] = None):
        self.cfg = cfg or TriggerConfig()

    def evaluate(self, state: GestureState, t_now: float) -> bool:
        """
        Decide whether the current state fires a trigger.

        Args:
            state: Gesture state for this frame; its last_trigger_timestamp is
                updated when the trigger fires
            t_now: Current monotonic time in milliseconds

        Returns:
            True if a spawn should happen now
        """
        if not state.detected or state.confidence <= self.cfg.confidence_threshold:
            return False

        last = state.last_trigger_timestamp
        if last is not None and t_now - last <= self.cfg.cooldown_ms:
            return False

        state.last_trigger_timestamp = t_now
        return True

    @staticmethod
    def reset(state: GestureState) -> None:
        """Forget the last trigger so the next confident frame fires."""
        state.last_trigger_timestamp = None


class GestureProcessor:
    """
    Main gesture processor that runs classification and triggering per frame.
    """

    def __init__(self, gesture_cfg: Optional[GestureConfig] = None,
                 trigger_cfg: Optional[TriggerConfig] = None,
                 classifier: Optional[GestureClassifier] = None):
        """Initialize gesture processor with configuration."""
        self.classifier = classifier or GestureClassifier(gesture_cfg)
        self.trigger = TriggerPolicy(trigger_cfg)
        self.state = GestureState()

    def process_frame(self, hands: Optional[Sequence[Any]],
                      t_now: float) -> Tuple[GestureResult, Optional[SpawnEvent]]:
        """
        Process a frame and return its classification and any spawn event.

        A malformed frame is skipped: it reports "invalid observation" and
        leaves stability history as it was.

        Args:
            hands: Hand observations for this frame (None if no hand detected)
            t_now: Current monotonic time in milliseconds

        Returns:
            Tuple of (gesture_result, spawn_event)
        """
        hands = list(hands) if hands is not None else []

        try:
            result = self.classifier.classify(hands)
        except InvalidObservation as e:
            logger.warning(f"⚠️ Skipping malformed frame: {e}")
            result = GestureResult(detected=False, confidence=0.0, metrics=None, reason=REASON_INVALID)

        self.state.apply(result)

        if not self.trigger.evaluate(self.state, t_now):
            return result, None

        center = midpoint(centroid(as_observation(hands[0]))[:2],
                          centroid(as_observation(hands[1]))[:2])
        event = SpawnEvent(
            timestamp=t_now,
            confidence=result.confidence,
            center=(float(center[0]), float(center[1]))
        )
        logger.info(f"✨ Gesture triggered at {t_now:.0f}ms (confidence {result.confidence:.2f})")
        return result, event
