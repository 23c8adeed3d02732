"""
Command-line replay of scripted matches.

Typical usage (from repo root):

    python -m scorekeeper.simulation.score_match --script scripts/short_match.json
"""
