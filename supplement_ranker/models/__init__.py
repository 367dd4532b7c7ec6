"""
Validated input models for the ranking engine.

Modules
-------
product : Ingredient + ProductQuality + Product (frozen, validated at construction).
profile : UserProfile + DetailedProfile (the user being ranked for).
"""
