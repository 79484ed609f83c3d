"""Employee shift scheduling"""
