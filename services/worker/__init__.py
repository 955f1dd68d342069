"""
Worker Service
==============

Consumes proof jobs from the queue and stores their results.
"""
