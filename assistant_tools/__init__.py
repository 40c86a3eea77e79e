"""Tool-call service for a voice/chat assistant.

Receives batches of named tool calls over HTTP, routes each one to the
reminder store or the question forwarder, and returns results correlated by
tool call id.
"""
