"""pmswitch.system — Host discovery."""
