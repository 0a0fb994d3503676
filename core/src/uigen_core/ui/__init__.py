"""Server-rendered UIGen pages.

Kept deliberately thin:
- sign-in / sign-up forms that post, then redirect to the project chosen after auth
- a read-only project page listing the chat and its tool-call chips

Auth: the signed auth-token cookie set by the sign-in/sign-up flow.
"""
