"""
打工排班媒合系統
"""
