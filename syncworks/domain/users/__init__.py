"""User accounts"""
