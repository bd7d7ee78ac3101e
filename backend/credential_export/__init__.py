"""
Credential export - moves credential records out of the store into a portable ZIP.
"""
