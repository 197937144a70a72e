"""
Remote catalog domain
"""
