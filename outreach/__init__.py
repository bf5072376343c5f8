"""Outreach participation tracking and leaderboard service."""
