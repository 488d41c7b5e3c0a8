"""Realtime infrastructure (Socket.IO presence, rooms and fan-out).

This package holds the live layer of the platform: questions, answers, AMA
chat, typing indicators, presence and private messages all share one socket
server and one connection registry.
"""
