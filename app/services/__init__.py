# Services package.
#
#   base               : generic EntityService (validation, uniqueness,
#                        cache-aside reads, invalidation on writes)
#   coffee_service     : EntityService bound to Coffee
#   category_service   : EntityService bound to Category
#   ingredient_service : EntityService bound to Ingredient
#
# Services receive their repository, cache, validator and mapper at
# construction and return ``Result`` values; the router layer maps error
# codes to HTTP status codes.
