"""Application services: demonstration routines and the driver."""
