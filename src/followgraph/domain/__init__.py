"""Pure domain logic: identities, records, and calendar-day arithmetic."""
