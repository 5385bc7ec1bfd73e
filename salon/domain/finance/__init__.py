"""Finance domain - cash-flow ledger, summaries and dashboard figures"""
