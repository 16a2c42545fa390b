"""
BizFlow: marketing platform recommendations for micro-businesses.
"""
