"""New order template: tells the seller what to deliver and to whom."""


class NewOrderTemplate:
    @staticmethod
    def render(context) -> dict:
        details = (
            f"Order ID: {context.order_reference}\n"
            f"Customer Name: {context.customer_name}\n"
            f"Customer Email: {context.customer_email}\n"
            f"Customer Phone: {context.customer_phone}\n"
            f"Delivery Address: {context.delivery_address}\n\n"
            f"Order Summary:\n{context.order_summary}"
        )
        return {
            "subject": f"New order {context.order_reference} from {context.customer_name}",
            "body": f"You have a new Cash on Delivery order.\n\n{details}\n",
            "text": f"New order {context.order_reference}\n{details}",
        }
