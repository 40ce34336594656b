"""
Schemas module - read models, forms and view models.

Difference between the three:
- Read models: transient copies of what the external API owns
- Forms: what the operator submits (validated before any API call)
- View models: what each page renders

Everything lives in jobboard.schemas.schemas.
"""
