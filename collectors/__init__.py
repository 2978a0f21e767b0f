"""SSH collectors package"""
