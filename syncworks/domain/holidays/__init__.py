"""Public holiday calendar"""
