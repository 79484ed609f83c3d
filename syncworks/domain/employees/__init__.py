"""Company employees and their monthly work statistics"""
