"""
Verifier Service
================

Offline verification of published proof artifacts.
"""
