"""Twilio provider gateway: TrustHub, A2P 10DLC messaging and number porting."""
