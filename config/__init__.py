# ==============================================================================
# PIPELINE CRM - CONFIG PACKAGE
# ==============================================================================
