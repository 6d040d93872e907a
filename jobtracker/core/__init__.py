"""
Core domain logic: exceptions, encryption, file rules, CSV export,
email classification and dashboard statistics.

Dependencies: None beyond cryptography (pure domain layer)
"""
