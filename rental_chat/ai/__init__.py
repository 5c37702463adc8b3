"""
Conversational property-matching pipeline.

intent -> (listings) -> composer -> generation -> (tools) -> selection -> sanitizer.
The orchestrator lives in `rental_chat.ai.agent`.
"""
