# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# STATUS: Function - Azure Function App components
# PURPOSE: Queue-triggered function exercised by tools/validate_queue_trigger.py
# CREATED: 17 OCT 2026
# ============================================================================
"""
Function App Module

Contains the components specific to the Azure Function App deployment:
- Configuration (queue names, storage connection setting)
- Queue echo logic used by the queue trigger in function_app.py
"""

__all__ = []
