"""Pure receipt parsing: OCR fragments to items, valuation, JSON recovery."""
