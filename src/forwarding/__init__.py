"""Authorized call-forwarding destinations and forwarding resolution."""
