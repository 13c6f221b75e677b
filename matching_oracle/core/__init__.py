"""
Core: domain models, instance generator, контракты и таксономия нарушений.

Не зависит от конкретного solver.
"""
