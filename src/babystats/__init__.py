"""Caregiving activity analytics: sleep, feeding and diaper statistics."""
