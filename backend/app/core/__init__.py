"""
Cross-cutting pieces shared by services and API routes:
domain exceptions and logging setup.
"""
