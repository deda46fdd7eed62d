# Catalog constants shared by services and routers.
CATEGORY_ALL = "all"  # sentinel: no category constraint on listings
SIMILAR_LIMIT = 6  # max products returned by the similar-products lookup

# Mongo collections
PRODUCTS_COLLECTION = "products"
PROMOS_COLLECTION = "promocodes"

# Uploads
UPLOAD_FIELD = "image"  # multipart field name carrying the file
UPLOAD_CHUNK_SIZE = 64 * 1024  # 64KB
