"""Pug guard AI: Guarding / Surprised / Alerted state machine."""
