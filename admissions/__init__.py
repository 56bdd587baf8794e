"""School admissions: counselling session calendar invites"""
