"""
Status state module.

Holds the Session store, the role permission table and the soft-limit
threshold evaluation.
"""
