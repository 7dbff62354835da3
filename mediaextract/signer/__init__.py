"""Signature headers and their building blocks for TikTok mobile API requests."""