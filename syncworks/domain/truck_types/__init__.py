"""Truck type catalogue and load-based recommendation"""
