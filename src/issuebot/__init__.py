"""Discord slash-command bridge for creating GitHub issues.

This package implements the interactions webhook for the issue bot:
- Ed25519 signature verification of inbound interactions
- Interaction routing (ping, slash command, modal submit)
- The issue form rendered in response to the slash command
- Deferred replies completed by a background GitHub issue creation
- Slash command registration against the Discord API
"""
