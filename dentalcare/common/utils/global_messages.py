class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Invalid credentials provided."
    INVALID_TOKEN = "Could not validate credentials. Please log in again."
    ACCOUNT_ALREADY_EXISTS = "An account with this email already exists."
    LOGOUT_SUCCESS = "Logout successful."

    # User Messages
    USER_NOT_FOUND = "User not found."
    USER_DELETED = "User deleted successfully."
    STAFF_ONLY = "Only clinic staff can perform this action."

    # Appointment Messages
    APPOINTMENT_NOT_FOUND = "Appointment not found."
    APPOINTMENT_CANCELLED = "Appointment cancelled successfully."
    APPOINTMENT_PATIENT_REQUIRED = "A patient must be specified when staff book an appointment."
    APPOINTMENT_PATIENT_INVALID = "Selected patient does not exist."
    APPOINTMENT_DOCTOR_INVALID = "Selected doctor does not exist."
    APPOINTMENT_STATUS_STAFF_ONLY = "Only staff can change the status of an appointment."
    APPOINTMENT_CANCEL_OWNER_ONLY = "Only the patient who booked an appointment can cancel it."

    # Service Messages
    SERVICE_NOT_FOUND = "Service not found."
    SERVICE_UNAVAILABLE = "Selected service is not available"
    SERVICE_NAME_TAKEN = "Service with this name already exists"
    SERVICE_DELETED = "Service deleted successfully."

    # Payment Messages
    PAYMENT_NOT_FOUND = "Payment not found."
    PAYMENT_APPOINTMENT_INVALID = "Appointment for this payment does not exist."
    PAYMENT_STATUS_STAFF_ONLY = "Only staff can record a payment outcome."

    # Reminder Messages
    REMINDER_NOT_FOUND = "Reminder not found."
    REMINDER_USER_INVALID = "Reminder recipient does not exist."
    REMINDER_APPOINTMENT_INVALID = "Appointment for this reminder does not exist."
    REMINDER_NOT_ADDRESSEE = "Only the recipient can mark a reminder as read."
    REMINDER_DELETED = "Reminder deleted successfully."

    # Patient Info Messages
    PATIENT_INFO_NOT_FOUND = "Patient information not found."
    PATIENT_INFO_EXISTS = "Patient information already exists"
