from notifications.seller.notifier import NotificationResult, OrderContext, SellerNotifier, SellerNotifierPort

__all__ = ["NotificationResult", "OrderContext", "SellerNotifier", "SellerNotifierPort"]
