"""
Platform Services Test Suite
Version: 1.0
"""
