"""Sneky Fox — grid stealth game simulation."""
