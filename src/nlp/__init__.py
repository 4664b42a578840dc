"""Payment intent extraction.

The nlp layer turns one English or Spanish sentence into a `ParseResult` (intent, amount, currency,
recipient) using linguistic annotations plus rule-based fallbacks on the raw text.
"""
