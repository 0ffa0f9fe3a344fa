"""
Haste - key-addressed document store service
"""
