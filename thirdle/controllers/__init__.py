"""
Controllers Package

HTTP endpoints of the game server.
"""
