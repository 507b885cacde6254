"""OfferBoard: accounts, job offers and recipient answers over a key-value store."""
