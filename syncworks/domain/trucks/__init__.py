"""Company truck fleet"""
