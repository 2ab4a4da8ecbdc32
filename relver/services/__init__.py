"""Application services for the relver CLI.

Services coordinate the domain layer (core/) with infrastructure (git/,
platform/).
"""
