"""Ride fare calculator: itemized fares with peak surcharge, promo codes and minimum fare."""
