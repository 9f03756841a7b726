"""
Implementation Module
=====================

Bounded context for the 10-stage field implementation workflow.

Stages:
1. Contract signed
2. Contract registered
3. Onboarding (welcome call, system registration, app install, tag audit)
4. Implementation visit
5. Field reports (installer, glazier, locksmith, supervisor)
6. Programming check and financial activation
7. Commercial visit
8. Assisted operation (interaction log)
9. Completion
10. Satisfaction survey (not part of the progress ratio)
"""

__version__ = "1.0.0"
