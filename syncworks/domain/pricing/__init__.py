"""Moving estimate calculation"""
