"""HTTP interface of the to-do service."""
