from models.locations import Location
from models.plots import Plot, plot_users
from models.users import User
from models.payment_schedules import PaymentSchedule

__all__ = ['Location', 'PaymentSchedule', 'Plot', 'User', 'plot_users',]
