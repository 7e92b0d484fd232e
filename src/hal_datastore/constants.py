LINKS_PROPERTY_NAME = "_links"
EMBEDDED_PROPERTY_NAME = "_embedded"
SELF_PROPERTY_NAME = "self"
HREF_PROPERTY_NAME = "href"

LOCAL_MODEL_IDENTIFIER_PREFIX = "local-model"
LOCAL_DOCUMENT_IDENTIFIER_PREFIX = "local-document"
