"""Plugin status package"""
