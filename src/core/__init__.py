"""Core domain package for certstream-slack.

Core contains event decoding, domain matching, and the per-event pipeline
without any websocket or Slack-specific code, keeping the business logic
portable.
"""
