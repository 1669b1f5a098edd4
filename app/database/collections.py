# Collection Names
COLLECTIONS = {
    'notifications': 'notifications',
    'reviews': 'reviews',
    'coupons': 'coupons',
    'system': 'system',
}

# Singleton documents inside the 'system' collection
SERVICE_STATUS_DOC_ID = 'service_status'
