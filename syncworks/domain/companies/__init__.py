"""Mover and referrer registration, company profiles"""
