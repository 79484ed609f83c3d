"""Login and session checks"""
