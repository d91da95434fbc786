"""URI composition, percent-escaping and path normalization"""
