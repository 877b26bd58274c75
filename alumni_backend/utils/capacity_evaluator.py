class CapacityEvaluator:
    """Decides whether a target (mentor or event) can admit one more participant."""

    def can_admit(self, current_count: int, limit: int | None) -> bool:
        """
        Check a participant count against an optional capacity limit.

        Callers pass the count of the relevant status class only (accepted
        mentorships, going attendees), never raw totals.

        Args:
            current_count (int): Participants already admitted.
            limit (int | None): Capacity ceiling; None means unlimited.

        Returns:
            bool: True when the limit is unset or not yet reached.
        """
        if limit is None:
            return True
        return current_count < limit
