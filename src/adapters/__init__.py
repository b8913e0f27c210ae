"""Adapters connecting the core pipeline to certstream and Slack."""
