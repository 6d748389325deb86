# logconfig.py
"""Shared logger for test modules."""

from merkle_trees.logging_config import get_test_logger

logger = get_test_logger("main")
