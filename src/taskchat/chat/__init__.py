"""
Chat transcript.

Components:
- chat_models.py: ChatMessage, MessageRole
- message_store.py: keyed transcript store
"""
