"""
Controllers Package

Contains the Flask blueprints exposing the game over HTTP.
"""
